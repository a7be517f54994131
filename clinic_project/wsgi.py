# clinic_project/wsgi.py

import atexit
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'clinic_project.settings')

application = get_wsgi_application()

# The process does not start without its database.
from core.database import close_database, ensure_database  # noqa: E402

ensure_database()
atexit.register(close_database)
