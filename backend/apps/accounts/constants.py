"""
Account provider constants.
"""


class ProviderId:
    """
    Provider identifiers stored on ``Account.provider_id``.

    A user has at most one account per provider.
    """

    CREDENTIAL = "credential"
    """Password account. The hash lives in ``Account.password``."""
