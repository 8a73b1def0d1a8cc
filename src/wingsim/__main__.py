import sys

from wingsim.cli import main

sys.exit(main())
