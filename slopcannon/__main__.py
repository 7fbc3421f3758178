import sys

from slopcannon.cli.main import main

sys.exit(main())
