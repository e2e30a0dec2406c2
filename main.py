"""
Flip-Clock Countdown Main Application

This is the entry point for the countdown service.
It wires together the countdown manager and the API routes.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Managers
from managers.countdown_manager import CountdownManager

# API routes
from routes import setup_countdown_routes

# Config
from config import COUNTDOWN_BLOCKS_PATH, DEFAULT_PORT, PRODUCTION_PORT

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Global manager instance (will be initialized in lifespan)
countdown_manager: CountdownManager = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan management for FastAPI application.
    Handles startup and shutdown tasks.
    """
    global countdown_manager

    # STARTUP
    logging.info("Starting flip-clock countdown service...")

    try:
        logging.info("Initializing countdown manager...")
        countdown_manager = CountdownManager()

        blocks_path = os.getenv("COUNTDOWN_BLOCKS_PATH", COUNTDOWN_BLOCKS_PATH)
        logging.info(f"Mounting countdown blocks from {blocks_path}...")
        countdown_manager.load_blocks(blocks_path)

        logging.info("Setting up API routes...")
        app.include_router(setup_countdown_routes(countdown_manager))

        logging.info("Flip-clock countdown service started successfully!")

    except Exception as e:
        logging.error(f"Failed to start countdown service: {e}")
        import traceback
        logging.error(f"Traceback: {traceback.format_exc()}")
        raise

    yield  # Application is running

    # SHUTDOWN
    logging.info("Shutting down flip-clock countdown service...")

    try:
        if countdown_manager:
            countdown_manager.stop_all()

        logging.info("Flip-clock countdown service shut down successfully!")

    except Exception as e:
        logging.error(f"Error during shutdown: {e}")


# Create FastAPI app with lifespan
app = FastAPI(
    title="Flip-Clock Countdown",
    description="Split-flap countdown boards to fixed target dates",
    version="1.0.0",
    lifespan=lifespan
)


if __name__ == "__main__":
    import argparse
    import uvicorn

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Flip-Clock Countdown - split-flap countdown server')
    parser.add_argument('--production', action='store_true',
                        help='Run in production mode (port 80)')
    parser.add_argument('--port', type=int, default=None,
                        help='Custom port (overrides --production)')
    parser.add_argument('--blocks', default=None,
                        help='YAML file with countdown blocks to mount at startup')
    args = parser.parse_args()

    if args.blocks:
        os.environ["COUNTDOWN_BLOCKS_PATH"] = args.blocks

    # Determine port
    if args.port:
        port = args.port
    elif args.production:
        port = PRODUCTION_PORT
    else:
        port = DEFAULT_PORT

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        log_level="info",
        reload=False
    )
