class CardThemeError(Exception):
    """Base class for errors raised at the package's I/O boundaries."""


class TemplateNotFoundError(CardThemeError):
    def __init__(self, template_id):
        super().__init__(f'Template with id "{template_id}" not found')
        self.template_id = template_id


class TemplateFormatError(CardThemeError):
    """A template document could not be parsed into a CardTemplate."""


class ConfigError(CardThemeError):
    """The configuration file exists but could not be read."""
