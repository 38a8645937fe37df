# core/load_plugins.py
def load_plugins():
    # Diagnostics providers
    from core.register_providers import register_providers

    register_providers()

    # Emission factors (warm the cache so a bad table file warns at startup)
    from services.emissions.emissions_factory import active_factors

    active_factors()
