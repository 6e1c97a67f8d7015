"""Server-side Shipi18n client and translation proxy."""
