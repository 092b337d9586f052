"""
Loyalty Service

Customer loyalty microservice: purchase recording, points accrual,
BRONZE/SILVER/GOLD status promotion and customer preferences.

Port: 8260
"""

__version__ = "1.0.0"
__service_name__ = "loyalty_service"
__service_port__ = 8260
