from django.conf import settings

DEFAULTS = {
    # Separator between member labels in compound state keys; '' splits keys into characters
    'STATE_DELIMITER': '',
    'EXPORT_FILENAME': 'nfa-config.json',
}


def get_option(name: str):
    """Returns a converter option from settings.NFA_CONVERTER, falling back to DEFAULTS."""
    options = getattr(settings, 'NFA_CONVERTER', {})
    return options.get(name, DEFAULTS[name])
