import sys

from bbclone.cli import main

sys.exit(main())
