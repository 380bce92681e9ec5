from mangum import Mangum
import sys
import os

# Add the parent directory to the path so we can import from main
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from main import app

# Serverless entrypoint; lifespan creates the campaigns table on cold start
handler = Mangum(app, lifespan="auto")
