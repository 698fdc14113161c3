import os
import sys

# Add src directory to Python path so 'court_records' package can be found
sys.path.append(os.path.join(os.getcwd(), 'src'))

wsgi_app = "court_records.api.server:app"
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# batch requests start their own process pool, sized by PARSE_WORKERS
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
threads = int(os.environ.get('GUNICORN_THREADS', '2'))
worker_class = "gthread"
worker_tmp_dir = "/dev/shm"

preload_app = False
accesslog = "-"
errorlog = "-"
loglevel = "info"
timeout = 60
