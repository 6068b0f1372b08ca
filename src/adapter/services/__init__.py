from .unit_of_work import SqlAlchemyUnitOfWork
from .token_cipher import AesCbcTokenCipher, generate_oauth_state
from .revolut_client import RevolutClient

__all__ = [
    "SqlAlchemyUnitOfWork",
    "AesCbcTokenCipher",
    "generate_oauth_state",
    "RevolutClient",
]
