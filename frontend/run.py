#!/usr/bin/env python3
"""
Run script for the Zeo Tourism admin frontend.
"""

import streamlit.web.cli as stcli
import sys
import os

if __name__ == "__main__":
    # Configuration
    host = os.getenv("STREAMLIT_HOST", "0.0.0.0")
    port = os.getenv("STREAMLIT_PORT", "8501")
    app_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app.py")

    # Set Streamlit configuration
    sys.argv = [
        "streamlit",
        "run",
        app_path,
        "--server.address", host,
        "--server.port", port,
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false"
    ]

    # Run Streamlit
    stcli.main()
