"""
akwaaba_shared — shared utilities, models, and configuration for Akwaaba Homes.

Usage:
    from akwaaba_shared.config import settings
    from akwaaba_shared.db import get_supabase_client
    from akwaaba_shared.models import Profile, Property, Inquiry
    from akwaaba_shared.constants import Role, PropertyStatus
    from akwaaba_shared.workflow import ensure_transition
"""

__version__ = "0.1.0"
