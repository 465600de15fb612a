"""
Service context for log lines.

Identifies which client process wrote a line when several run against the same backend.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'eventora-client')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    try:
        host = socket.gethostname().split('.')[0] or 'localhost'
    except OSError:
        host = 'localhost'

    return f'{service_name}@{deploy_env}:{host}:{os.getpid()}'
