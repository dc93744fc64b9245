import os
import sys

# Add src directory to Python path so 'court_calendar' package can be found
sys.path.append(os.path.join(os.getcwd(), 'src'))

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The registry cache is per process; more workers means more registry loads.
workers = int(os.environ.get('GUNICORN_WORKERS', '1'))
threads = int(os.environ.get('GUNICORN_THREADS', '4'))
worker_class = "gthread"
worker_tmp_dir = "/dev/shm"

preload_app = False
accesslog = "-"
errorlog = "-"
loglevel = "info"
# AI extraction of a full report can take well over a minute
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '240'))
wsgi_app = "court_calendar.api.server:app"
