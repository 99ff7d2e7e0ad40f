"""Development e-mail transport.

Nothing leaves the process and nothing is kept: each message is reduced to a
log line naming the event, recipient and subject. Bodies such as reset links
are never written out.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger("notify")


def send(event: str, payload: Dict[str, Any], target: Optional[str]) -> None:
    """Deliver ``payload`` for ``event`` to ``target``."""
    logger.info("email %s to %s: %s", event, target, payload.get("subject", ""))
