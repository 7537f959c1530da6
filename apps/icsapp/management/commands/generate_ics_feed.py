from django.core.management.base import BaseCommand, CommandError

from core.exceptions import QuorumCalError

from ...services.ics_service import ICSService


class Command(BaseCommand):
    help = "Renders the iCalendar feed of a calendar to stdout"

    def add_arguments(self, parser):
        parser.add_argument("token", help="ICS token of the calendar")
        parser.add_argument(
            "--host",
            default="",
            help="Domain embedded in event UIDs (defaults to QUORUMCAL['APP_DOMAIN'])",
        )

    def handle(self, *args, **options):
        token = options["token"]
        if token.endswith(".ics"):
            token = token[: -len(".ics")]

        try:
            feed = ICSService().generate_feed(token, host=options["host"])
        except QuorumCalError as e:
            raise CommandError(f"Failed to generate feed: {e.message}") from e

        self.stdout.write(feed, ending="")
