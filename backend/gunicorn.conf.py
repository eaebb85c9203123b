# gunicorn.conf.py — Production server configuration.
#
# Run from backend/ with:
#   gunicorn api.main:app -c gunicorn.conf.py

# Each analysis holds two videos (up to 50 MB each) in memory while Gemini
# works, so keep the worker count modest.
workers = 2
worker_class = "uvicorn.workers.UvicornWorker"

# Bind
bind = "0.0.0.0:8000"

# Logging — stdout/stderr for the process manager; JSON comes from core/logging.py
accesslog = "-"
errorlog  = "-"
loglevel  = "info"

# Timeouts — video analysis regularly takes over a minute
timeout          = 300   # seconds before a worker is killed and restarted
keepalive        = 5     # seconds to wait for the next request on a keep-alive connection
graceful_timeout = 60    # seconds to finish in-flight analyses on SIGTERM
