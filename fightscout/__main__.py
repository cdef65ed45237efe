import sys

from fightscout.cli import main

sys.exit(main())
