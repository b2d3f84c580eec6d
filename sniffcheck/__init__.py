"""Type-quality checks, performance audits and configuration for TypeScript and Next.js projects."""

__version__ = "0.2.1"
__all__ = ["__version__"]