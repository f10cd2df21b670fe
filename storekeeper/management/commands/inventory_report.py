"""
Management command to print the inventory report.

Usage:
    python manage.py inventory_report
    python manage.py inventory_report --json
"""

import json

from django.core.management.base import BaseCommand

from storekeeper import inventory


class Command(BaseCommand):
    """Inventory report command."""

    help = 'Prints stock status for every active product'

    def add_arguments(self, parser):
        parser.add_argument(
            '--json',
            action='store_true',
            help='Output the full report as JSON'
        )

    def handle(self, *args, **options):
        report = inventory.report()

        if options['json']:
            self.stdout.write(json.dumps(report, default=str, indent=2))
            return

        for row in report['products']:
            self.stdout.write(
                f"{row['status']:<13} {row['stock']:>6}  {row['name']}"
            )

        summary = report['summary']
        self.stdout.write(
            self.style.SUCCESS(
                f"{summary['totalProducts']} product(s): "
                f"{summary['outOfStockProducts']} out of stock, "
                f"{summary['lowStockProducts']} low, "
                f"{summary['inStockProducts']} in stock. "
                f"Total value: {summary['totalValue']}"
            )
        )
