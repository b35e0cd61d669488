import sys

from structure_lint import main

sys.exit(main())
