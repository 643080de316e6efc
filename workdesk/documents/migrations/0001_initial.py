import uuid

import django.utils.timezone
from django.db import migrations, models

import workdesk.documents.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('doc_no', models.CharField(default=workdesk.documents.models.default_doc_no, help_text='Document number, editable', max_length=50)),
                ('title', models.CharField(max_length=200)),
                ('content', models.TextField(blank=True, default='')),
                ('dept', models.CharField(blank=True, default='', max_length=100)),
                ('enforcer_name', models.CharField(max_length=100)),
                ('enforced_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('created_by', models.CharField(blank=True, default='', max_length=50)),
            ],
            options={
                'db_table': 'documents',
                'ordering': ['-created_at'],
            },
        ),
    ]
