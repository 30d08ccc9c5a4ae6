"""Domain layer: company/user models and typed wrappers over the HR backend API.

Domain modules do not depend on the UI. The transport is passed in.
"""
