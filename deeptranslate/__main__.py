import sys

from deeptranslate.main import main

sys.exit(main())
