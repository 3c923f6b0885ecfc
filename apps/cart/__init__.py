"""Cart app package.

The shopper's cart: line items of three kinds (rental, purchase, quote)
merged by identity, persisted in the session and checked out as a
booking request.
"""
