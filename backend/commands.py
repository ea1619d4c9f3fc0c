import click
from extensions import db
from models import User, YearGroup


def register_commands(app):

    @app.cli.command('create-admin')
    @click.option('--email', '-e', required=True, help='Email address for the admin account')
    @click.option('--password', '-p', prompt=True, hide_input=True, help='Password (will prompt if omitted)')
    @click.option('--name', '-n', default='Administrator', help='Full name')
    def create_admin(email, password, name):
        """Create or update an admin user."""
        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user:
            user.full_name = name or user.full_name
            user.role = 'admin'
            user.set_password(password)
            click.echo(f'Updated admin {email}')
        else:
            user = User(email=email, full_name=name, role='admin')
            user.set_password(password)
            db.session.add(user)
            click.echo(f'Created admin {email}')
        db.session.commit()

    @app.cli.command('seed-year-groups')
    @click.option('--first', default=1, show_default=True, type=int)
    @click.option('--last', default=13, show_default=True, type=int)
    def seed_year_groups(first, last):
        """Create the 'Y<n>' year groups that student and schedule imports match against."""
        existing = {name.lower() for (name,) in db.session.query(YearGroup.name)}
        created = 0
        for number in range(first, last + 1):
            name = f'Y{number}'
            if name.lower() not in existing:
                db.session.add(YearGroup(name=name))
                created += 1
        db.session.commit()
        click.echo(f'Created {created} year groups')
