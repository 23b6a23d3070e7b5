"""
Service identification prefix for log lines.

Every record carries `<service>@<env>:<instance>` so logs from several
booking API replicas can be told apart once aggregated.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'court_booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a short hostname, local runs fall back to the PID
    instance = os.getenv('HOSTNAME') or socket.gethostname() or str(os.getpid())
    if deploy_env == 'local_dev':
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
