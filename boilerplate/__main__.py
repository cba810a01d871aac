import sys

from boilerplate.cli import main

sys.exit(main())
