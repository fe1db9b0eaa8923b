import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('slug', models.CharField(editable=False, max_length=200)),
                ('description', models.TextField()),
                ('overview', models.TextField()),
                ('image', models.CharField(max_length=500)),
                ('image_asset', models.CharField(blank=True, default='', max_length=500)),
                ('venue', models.CharField(max_length=200)),
                ('location', models.CharField(max_length=200)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('mode', models.CharField(max_length=50)),
                ('audience', models.CharField(max_length=200)),
                ('agenda', models.JSONField(default=list)),
                ('organizer', models.CharField(max_length=200)),
                ('tags', models.JSONField(default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['-created_at'], name='event_created_idx'),
                    models.Index(fields=['date', 'time'], name='event_schedule_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('slug',), name='event_slug_unique'),
                    models.UniqueConstraint(fields=('title', 'date', 'time', 'venue'), name='event_schedule_unique'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('email', models.EmailField(max_length=254)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to='events.event')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['email'], name='booking_email_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'email'), name='booking_event_email_unique'),
                ],
            },
        ),
    ]
