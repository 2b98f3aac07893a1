from django.core.management.base import BaseCommand

from services.identity_service import issue_development_token


class Command(BaseCommand):
    help = 'Print a bearer token accepted by JWTIdentityOracle for local development.'

    def add_arguments(self, parser):
        parser.add_argument('email')

    def handle(self, *args, **options):
        self.stdout.write(issue_development_token(options['email']))
