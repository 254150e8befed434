from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Marker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.JSONField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Route",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start", models.JSONField()),
                ("end", models.JSONField()),
                ("waypoints", models.JSONField(blank=True, default=list)),
                ("overview_path", models.JSONField(default=list)),
                ("distance", models.CharField(blank=True, max_length=64)),
                ("duration", models.CharField(blank=True, max_length=64)),
                ("color", models.CharField(choices=[("#0000FF", "Blue"), ("#FF0000", "Red"), ("#00FF00", "Green"), ("#800080", "Purple"), ("#FFA500", "Orange")], default="#0000FF", max_length=7)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="RouteState",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("session_key", models.CharField(max_length=64, unique=True)),
                ("route_step", models.CharField(choices=[("start", "Start"), ("waypoint", "Waypoint"), ("end", "End"), ("color", "Color")], default="waypoint", max_length=10)),
                ("start_location", models.JSONField(blank=True, null=True)),
                ("color", models.CharField(blank=True, choices=[("#0000FF", "Blue"), ("#FF0000", "Red"), ("#00FF00", "Green"), ("#800080", "Purple"), ("#FFA500", "Orange")], max_length=7, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
    ]
