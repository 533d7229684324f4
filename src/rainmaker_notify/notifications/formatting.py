"""
Display formatting for notification timestamps.
"""

from datetime import datetime
from typing import Tuple


def date_time_strings(timestamp: float) -> Tuple[str, str]:
    """
    Format a timestamp for the notification list.
    
    Args:
        timestamp: Seconds since epoch
        
    Returns:
        (date, time) in local time, e.g. ("15-Jan-2025", "10:30:00 AM")
    """
    moment = datetime.fromtimestamp(timestamp)
    return moment.strftime("%d-%b-%Y"), moment.strftime("%I:%M:%S %p")
