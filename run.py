import os
import sys

from dotenv import load_dotenv

from lunch_menus.worker import main

# development.env wins over .env when present
if os.path.exists('development.env'):
    load_dotenv('development.env')
    print("\n🔧 Using development environment", file=sys.stderr)

if __name__ == "__main__":
    sys.exit(main())
