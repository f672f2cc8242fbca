import sys

from weathertwin.cli import main

sys.exit(main())
