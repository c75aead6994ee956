import sys

from sectorfs.main import main

sys.exit(main())
