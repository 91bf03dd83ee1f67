import sys

from pagediff.cli import main

sys.exit(main())
