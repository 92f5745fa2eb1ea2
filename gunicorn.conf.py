# gunicorn.conf.py
import multiprocessing, os

# gunicorn -c gunicorn.conf.py ephemeris_api.main:app
bind = f"0.0.0.0:{os.getenv('PORT','3000')}"
workers = max(2, multiprocessing.cpu_count())  # swisseph calls are CPU-bound and not thread-safe
threads = 1
worker_class = "sync"
timeout = 30
graceful_timeout = 30
keepalive = 2
accesslog = "-"   # stdout
errorlog = "-"    # stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# add request id if present
access_log_format = (
    '%(h)s - "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" '
    'req_id:%({X-Request-ID}i)s rt:%(L)s'
)
