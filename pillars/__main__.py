import sys

from pillars.cli import main

sys.exit(main())
