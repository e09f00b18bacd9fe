import sys

from pysh.main import main

sys.exit(main())
