import sys

from tktranslate.main import main

sys.exit(main())
