"""
Services.

One service per remote system. Services turn command parameters into
API calls and return typed results; they never print.
"""
