# Generated manually for variations app

import apps.variations.models
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('variations', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='variationorder',
            name='ffc_rsg_proposed_file',
            field=models.FileField(blank=True, max_length=500, upload_to=apps.variations.models.vo_document_path),
        ),
        migrations.AlterField(
            model_name='variationorder',
            name='rsg_assessed_file',
            field=models.FileField(blank=True, max_length=500, upload_to=apps.variations.models.vo_document_path),
        ),
        migrations.AlterField(
            model_name='variationorder',
            name='dvo_rr_approved_file',
            field=models.FileField(blank=True, max_length=500, upload_to=apps.variations.models.vo_document_path),
        ),
    ]
