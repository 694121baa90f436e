"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error classification, normalization, and formatting
- Security middleware, rate limiting, and token decoding
- Request context middleware
- Logging configuration
"""
