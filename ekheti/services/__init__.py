"""
Clients for the third-party REST APIs eKheti depends on (weather, mandi prices, news).
"""
