import apps.inventory.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="car",
            name="unavailable_dates",
            field=models.JSONField(
                blank=True, default=list, validators=[apps.inventory.validators.validate_calendar_days]
            ),
        ),
        migrations.AlterField(
            model_name="roomnumber",
            name="unavailable_dates",
            field=models.JSONField(
                blank=True, default=list, validators=[apps.inventory.validators.validate_calendar_days]
            ),
        ),
        migrations.AlterField(
            model_name="tour",
            name="available_dates",
            field=models.JSONField(
                blank=True, default=list, validators=[apps.inventory.validators.validate_calendar_days]
            ),
        ),
    ]
