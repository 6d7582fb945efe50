import sys

from updatebot.main import main

sys.exit(main())
