import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='DataRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('request_no', models.CharField(blank=True, default='', max_length=20)),
                ('title', models.CharField(max_length=200)),
                ('requester_id', models.CharField(db_index=True, max_length=50)),
                ('requester_name', models.CharField(blank=True, default='', max_length=100)),
                ('template_id', models.UUIDField(blank=True, help_text='Source template, informational only', null=True)),
                ('target_ids', models.JSONField(default=list, help_text='Roster employee IDs')),
                ('items', models.JSONField(default=list, help_text='Item definition snapshot')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'requests',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DataResponse',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('target_id', models.CharField(max_length=50)),
                ('target_name', models.CharField(blank=True, default='', max_length=100)),
                ('values', models.JSONField(blank=True, default=dict)),
                ('not_applicable', models.BooleanField(default=False)),
                ('submitted_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='collection.datarequest')),
            ],
            options={
                'db_table': 'responses',
                'ordering': ['-submitted_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='dataresponse',
            constraint=models.UniqueConstraint(fields=('request', 'target_id'), name='unique_response_per_target'),
        ),
    ]
