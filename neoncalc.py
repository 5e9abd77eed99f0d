"""
NeonCalc
Main application entry point
"""
import atexit
import logging
import os
import subprocess
import sys
import tkinter as tk

import config
from api_client import RemoteComputeClient
from compute_service import ComputeService
from database import Database
from gui import NeonCalcGUI
from history_manager import HistoryManager

logger = logging.getLogger(__name__)

# Global variable to track API process
api_process = None


def start_api_server():
    """Start the Flask API server in a separate process"""
    global api_process
    try:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        api_path = os.path.join(script_dir, 'api.py')

        api_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
        print(f"API server started (PID: {api_process.pid})")
    except OSError as e:
        logger.error("Failed to start API server: %s", e)


def cleanup_api_server():
    """Terminate the API server when the main application exits"""
    global api_process
    if api_process:
        try:
            api_process.terminate()
            api_process.wait(timeout=5)
            print("API server stopped")
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("Error stopping API server: %s", e)
        api_process = None


def choose_service():
    """Use the REST API when it answers, else compute locally"""
    client = RemoteComputeClient()
    if client.wait_until_available():
        print("="*60)
        print(f"Connected to {config.APP_NAME} API at {client.base_url}")
        print("="*60)
        return client
    logger.warning("API at %s is unreachable, using local fallback", client.base_url)
    return ComputeService(HistoryManager(Database(config.LOCAL_DB_PATH)))


def main():
    config.setup_logging()

    # Start the API server
    start_api_server()

    # Register cleanup function to run on exit
    atexit.register(cleanup_api_server)

    # Start the GUI
    root = tk.Tk()
    NeonCalcGUI(root, choose_service())
    root.mainloop()

    # Cleanup when GUI closes
    cleanup_api_server()


if __name__ == "__main__":
    main()
