"""Django project package for the Numora trading dashboard."""
