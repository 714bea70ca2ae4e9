#!/usr/bin/env python3
"""
Startup script for the Hockey Pool Injury API
"""

import sys
import os

# Add the project root to Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

# Now we can import and run
import uvicorn

from hockey_pool.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "hockey_pool.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
        reload_dirs=[project_root]
    )
