import sys

from sentibench.cli import main

sys.exit(main())
