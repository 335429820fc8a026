#!/usr/bin/env python3
"""Run the stop game API server."""

import logging
import os

import uvicorn


def main():
    logging.basicConfig(level=logging.INFO)
    host = os.environ.get('STOP_HOST', '0.0.0.0')
    port = int(os.environ.get('STOP_PORT', '8000'))
    print("Starting Stop API server...")
    print(f"API documentation available at: http://localhost:{port}/docs")
    uvicorn.run(
        "server.app:app",
        host=host,
        port=port,
        reload=True
    )


if __name__ == "__main__":
    main()
