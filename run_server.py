#!/usr/bin/env python3
"""Run the romaja API server."""

import os

import uvicorn


def main():
    print("Starting Romaja API server...")
    print("API documentation available at: http://localhost:8000/docs")
    uvicorn.run(
        "server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=os.environ.get('ROMAJA_LOG_LEVEL', 'info')
    )


if __name__ == "__main__":
    main()
