# provisioning/errors.py
"""Base error for every failure that ends a provisioning request."""


class ProvisioningError(Exception):
    """
    Base provisioning error.

    Subclasses live next to the collaborator that raises them
    (auth, persistence, billing). The message is returned to the
    caller verbatim.
    """
    pass
