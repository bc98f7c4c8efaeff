"""AWS Lambda entry point.

Mangum translates API Gateway events, REST API (payload v1) and
HTTP API (payload v2) alike, into ASGI so one FastAPI app serves both.
"""

from mangum import Mangum

from src.logging.audit import setup_logging
from src.main import app

# lifespan is off under Lambda, so configure logging at cold start
setup_logging()

handler = Mangum(app, lifespan="off")
