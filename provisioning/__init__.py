"""
Session provisioning.

Ensures a caller has a Stripe customer and issues a checkout or
billing-portal session. Import the entry point from
``provisioning.service``.
"""

from provisioning.errors import ProvisioningError

__all__ = ["ProvisioningError"]
