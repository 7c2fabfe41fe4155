#!/usr/bin/env python
"""
Database initialization script for OfficeDesk.
Creates the MySQL database, runs migrations and seeds roles.
"""
import os
import sys
import subprocess
import pymysql

# Database configuration
DB_CONFIG = {
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '3306')),
    'user': os.environ.get('DB_USER', 'root'),
    'password': os.environ.get('DB_PASSWORD', ''),
    'charset': 'utf8mb4'
}

DB_NAME = os.environ.get('DB_NAME', 'officedesk')


def create_database():
    """Create database if not exists."""
    try:
        conn = pymysql.connect(**DB_CONFIG)
        try:
            with conn.cursor() as cursor:
                cursor.execute("SHOW DATABASES LIKE %s", (DB_NAME,))
                if cursor.fetchone():
                    print(f"Database '{DB_NAME}' already exists.")
                else:
                    cursor.execute(
                        f"CREATE DATABASE `{DB_NAME}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                    )
                    print(f"Database '{DB_NAME}' created successfully.")
        finally:
            conn.close()
        return True

    except pymysql.Error as e:
        print(f"Error creating database: {e}")
        return False


def manage(*args, capture=True):
    """Run a manage.py command against the MySQL settings."""
    env = dict(os.environ, DB_ENGINE='mysql')
    result = subprocess.run(
        [sys.executable, 'manage.py', *args],
        capture_output=capture,
        text=True,
        env=env
    )
    if capture:
        print(result.stdout)
        if result.stderr:
            print(result.stderr)
    return result.returncode == 0


def main():
    """Main function."""
    print("=" * 50)
    print("OfficeDesk Database Initialization")
    print("=" * 50)

    if not create_database():
        print("\nFailed to create database. Exiting.")
        sys.exit(1)

    print("\nRunning migrations...")
    if not manage('migrate'):
        print("\nFailed to run migrations. Exiting.")
        sys.exit(1)

    print("\nCreating roles...")
    manage('init_roles')

    print("\nCreating superuser...")
    print("Please enter superuser details:")
    manage('createsuperuser', capture=False)

    print("\n" + "=" * 50)
    print("Database initialization completed!")
    print("=" * 50)


if __name__ == '__main__':
    main()
