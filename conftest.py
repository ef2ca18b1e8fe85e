"""Configure pytest for the stripe-session project."""
import os
import sys
from pathlib import Path

# =============================================================================
# Test Environment Configuration
# =============================================================================
# Set environment for tests BEFORE any imports so app.main loads a
# complete configuration. No real Stripe or Supabase call is made:
# tests patch the client boundaries.
os.environ.setdefault("RAILWAY_ENVIRONMENT", "test")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy_key_for_tests")
os.environ.setdefault("STRIPE_PRICE_ID", "price_test_premium_monthly")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key-for-tests")

app_path = Path(__file__).parent
if str(app_path) not in sys.path:
    sys.path.insert(0, str(app_path))
