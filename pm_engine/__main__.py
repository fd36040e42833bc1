import sys

from pm_engine.run_analysis import main

sys.exit(main())
