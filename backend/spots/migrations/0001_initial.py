# Generated migration for spots app

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Spot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Display name, usually 'Place, Country'", max_length=255)),
                ('country', models.CharField(help_text='Country name, matched against the region table', max_length=120)),
                ('latitude', models.FloatField(help_text='Latitude in decimal degrees')),
                ('longitude', models.FloatField(help_text='Longitude in decimal degrees')),
                ('description', models.TextField(blank=True, default='')),
                ('wave_size', models.CharField(blank=True, help_text='Free text descriptor: Flat, Small, Medium, Strong, Varied...', max_length=120, null=True)),
                ('temp_range', models.CharField(blank=True, default='', help_text='Temperature range in Celsius', max_length=60)),
                ('best_months', models.CharField(blank=True, default='', help_text="e.g. 'Dec-Mar'", max_length=60)),
                ('local_attractions', models.TextField(blank=True, default='')),
                ('tags', models.JSONField(blank=True, default=list)),
                ('windguru_code', models.CharField(blank=True, max_length=20, null=True)),
                ('kite_schools', models.JSONField(blank=True, default=list, help_text="List of 'name|mapsUrl|rating|reviewCount' strings")),
                ('number_of_schools', models.PositiveIntegerField(blank=True, null=True)),
                ('difficulty_level', models.CharField(blank=True, max_length=120, null=True)),
                ('conditions', models.JSONField(blank=True, default=list)),
                ('accommodation_options', models.JSONField(blank=True, default=list)),
                ('food_options', models.JSONField(blank=True, default=list)),
                ('culture', models.TextField(blank=True, null=True)),
                ('average_school_cost', models.FloatField(blank=True, help_text='Average daily lesson cost', null=True)),
                ('average_accommodation_cost', models.FloatField(blank=True, help_text='Average nightly stay cost', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'spots_spot',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['country'], name='spots_spot_country_idx')],
            },
        ),
        migrations.CreateModel(
            name='WindCondition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('month', models.PositiveSmallIntegerField(help_text='1-12 for Jan-Dec', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('wind_speed', models.FloatField(help_text='Average wind speed in knots')),
                ('wind_quality', models.CharField(choices=[('Poor', 'Poor'), ('Moderate', 'Moderate'), ('Good', 'Good'), ('Excellent', 'Excellent')], help_text='Poor, Moderate, Good, Excellent', max_length=10)),
                ('air_temp', models.FloatField(blank=True, help_text='Average air temperature in Celsius', null=True)),
                ('water_temp', models.FloatField(blank=True, help_text='Average water temperature in Celsius', null=True)),
                ('seasonal_notes', models.TextField(blank=True, null=True)),
                ('spot', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='wind_conditions', to='spots.spot')),
            ],
            options={
                'db_table': 'spots_wind_condition',
                'ordering': ['spot', 'month'],
                'indexes': [models.Index(fields=['month', 'wind_quality'], name='spots_wc_month_quality_idx')],
                'unique_together': {('spot', 'month')},
            },
        ),
    ]
