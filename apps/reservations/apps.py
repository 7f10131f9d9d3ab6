from django.apps import AppConfig


class ReservationsConfig(AppConfig):
    name = 'apps.reservations'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from shared.application.message_bus import message_bus
        from apps.reservations.application.command_handlers import register_handlers

        register_handlers(message_bus)
