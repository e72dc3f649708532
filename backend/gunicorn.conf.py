import os

# App
wsgi_app = "authsvc:create_app()"

# Bind & workers (all workers share JWT_SECRET_KEY and the refresh store)
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
