"""
RideHub Identity Service

Authentication, profile management and admin review for a ride-hailing
platform with three roles:
1. Riders - sign up, log in and manage their profile
2. Drivers - additionally maintain vehicle details, documents and availability
3. Admins - approve or reject drivers and manage account status
"""

__version__ = "0.1.0"
