import sys

from lasttx.cli import main

sys.exit(main())
