import sys

from confstore.cli import main

sys.exit(main())
