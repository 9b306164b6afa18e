"""Infrastructure modules for the localization library.

Centralized infrastructure components:
- configuration: Settings management (Settings, LocalizeSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- services: Application-scoped providers (get_settings, get_bundle_resolver)
"""
