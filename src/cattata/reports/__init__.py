"""Report pagination and the activity/inactivity report builders."""
