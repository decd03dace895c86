"""Lambda entry point; pair it with ``INFRASTRUCTURE_PROVIDER=aws``."""

from mangum import Mangum

from libraryman.app_setup import build_app

app = build_app()

lambda_handler = Mangum(app, lifespan="auto")
