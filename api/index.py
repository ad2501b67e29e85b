import sys
import os

# Add the project root to sys.path to allow imports from backend
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.app.core.config import settings
from backend.app.core.log import setup_logging
from backend.app.main import create_app

setup_logging(settings.LOG_LEVEL)

# Vercel needs the variable 'app'. Credentials are not checked here; a
# missing one fails each request with a 500.
app = create_app(settings)
