import sys

from extupdate.main import main

sys.exit(main())
