"""
Ledger dependency for API routes
"""

from fastapi import Request

from ..ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    """Return the ledger attached to the running application"""
    return request.app.state.ledger
