"""
Serverless Function Entry Point
Exports the FastAPI app for AWS Lambda / Vercel Python runtimes
"""
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mangum import Mangum
from app.main import app

# Lifespan creates the tables on cold start
handler = Mangum(app, lifespan="auto")
