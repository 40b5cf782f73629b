import sys

from gateway_bridge.main import main

sys.exit(main())
