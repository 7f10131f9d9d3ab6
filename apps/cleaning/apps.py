from django.apps import AppConfig


class CleaningConfig(AppConfig):
    name = 'apps.cleaning'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from shared.application.message_bus import message_bus
        from apps.cleaning.application.handlers import register_handlers

        register_handlers(message_bus)
