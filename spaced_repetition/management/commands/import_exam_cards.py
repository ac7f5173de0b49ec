from django.core.management.base import BaseCommand, CommandError

from spaced_repetition.services.cards import get_manager


class Command(BaseCommand):
    help = "Create review cards for every question of an exam, keeping existing progress."

    def add_arguments(self, parser):
        parser.add_argument("--owner", required=True, help="Learner the cards belong to")
        parser.add_argument("--exam", required=True, help="Exam identifier")
        parser.add_argument(
            "--questions", type=int, required=True, help="Number of questions in the exam"
        )

    def handle(self, *args, **options):
        report = get_manager().import_exam(
            options["owner"], options["exam"], options["questions"]
        )

        self.stdout.write(
            self.style.SUCCESS(
                f"{len(report.created)} created, {len(report.existing)} already present"
            )
        )
        for source_ref, error in report.failed.items():
            self.stdout.write(self.style.ERROR(f"{source_ref}: {error}"))

        if not report.ok:
            raise CommandError(f"{len(report.failed)} card(s) could not be imported")
