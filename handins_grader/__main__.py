import sys

from handins_grader.main import main

sys.exit(main())
