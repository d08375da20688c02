import sys

from hngrep.cli import main

sys.exit(main())
