"""
Management commands: create tables, add staff users, run the server
"""
import argparse
import getpass
import sys

from coffee_pos.config import settings
from coffee_pos.database import create_db_engine, create_session_factory, init_db
from coffee_pos.exceptions import CoffeePosError
from coffee_pos.logging_config import configure_logging
from coffee_pos.repositories.document_store import SqlDocumentStore
from coffee_pos.schemas.auth import StaffRegister
from coffee_pos.services.auth_service import StaffAuthService


def create_staff(args) -> int:
    """Add a staff user to the configured database"""
    password = args.password or getpass.getpass("Password: ")
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine, settings)
    db = create_session_factory(engine)()
    try:
        auth = StaffAuthService(SqlDocumentStore(db), settings.SECRET_KEY)
        user = auth.register(StaffRegister(
            email=args.email,
            password=password,
            display_name=args.name
        ))
        print(f"✓ Staff user created: {user.email} (ID: {user.id})")
        return 0
    except CoffeePosError as e:
        print(f"✗ Could not create staff user: {e}")
        return 1
    finally:
        db.close()
        engine.dispose()


def serve(args) -> int:
    """Run the API with uvicorn"""
    import uvicorn
    
    uvicorn.run("coffee_pos.main:app", host=args.host, port=args.port or settings.SERVICE_PORT)
    return 0


def main(argv=None) -> int:
    configure_logging(settings.SERVICE_NAME, settings.LOG_LEVEL)
    
    parser = argparse.ArgumentParser(prog="coffee-pos", description="Coffee POS management")
    subcommands = parser.add_subparsers(dest="command", required=True)
    
    staff = subcommands.add_parser("create-staff", help="Add a staff user")
    staff.add_argument("email")
    staff.add_argument("--name", required=True, help="Display name")
    staff.add_argument("--password", help="Password (prompted if omitted)")
    staff.set_defaults(handler=create_staff)
    
    server = subcommands.add_parser("serve", help="Run the API server")
    server.add_argument("--host", default="0.0.0.0")
    server.add_argument("--port", type=int)
    server.set_defaults(handler=serve)
    
    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
