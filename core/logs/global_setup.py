from core.logs.setup_logs import setup_logs

setup_logs()
