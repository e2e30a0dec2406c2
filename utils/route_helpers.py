"""
Shared route helper utilities.

Reduces boilerplate in the countdown routes for lookups and error mapping.
"""
import logging

from fastapi import HTTPException

from countdown.block import CountdownConfigError


def require_countdown(countdown_manager, countdown_id: str):
    """
    Look up a mounted countdown.

    Args:
        countdown_manager: CountdownManager instance
        countdown_id: Id of the countdown

    Returns:
        The MountedCountdown

    Raises:
        HTTPException: If no such countdown is mounted
    """
    mounted = countdown_manager.get(countdown_id)
    if mounted is None:
        raise HTTPException(status_code=404, detail=f"Countdown not found: {countdown_id}")
    return mounted


def config_error_response(error: CountdownConfigError, countdown_id: str = None) -> HTTPException:
    """
    Map a rejected block to a 400 carrying its diagnostic.

    Args:
        error: The configuration error raised during validation
        countdown_id: Id the block was submitted under, for logging

    Returns:
        HTTPException to raise
    """
    logging.info(f"Rejected countdown {countdown_id or '<new>'}: {error.diagnostic}")
    return HTTPException(status_code=400, detail=error.diagnostic)
