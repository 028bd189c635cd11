#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import sys

from config.django import use_settings_for_env


def main():
    use_settings_for_env()
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
