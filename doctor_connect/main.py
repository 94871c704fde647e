"""
Command-line entry point.

Each subcommand mirrors one action of the doctor app: sign up, log in,
show the signed-in doctor, list and answer patient requests, log out.
Every failure is reported as a user-facing message with exit status 1.
"""

import argparse
import asyncio
import getpass
import logging
import sys

import sentry_sdk

from doctor_connect.client import DoctorApi, create_doctor_api
from doctor_connect.config.settings import get_settings
from doctor_connect.integrations.doctor_api.error_handler import get_exception_message
from doctor_connect.integrations.doctor_api.exceptions import DoctorApiError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def _login(api: DoctorApi, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    auth = await api.auth.login({"email": args.email, "password": password})
    name = (auth.doctor or {}).get("name") or args.email
    if not auth.persisted:
        print(f"Logged in as {name}, but the session could not be saved. Please try again.", file=sys.stderr)
        return 1
    print(f"Logged in as {name}")
    return 0


async def _signup(api: DoctorApi, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    auth = await api.auth.signup(
        {
            "name": args.name,
            "phoneNumber": args.phone,
            "email": args.email,
            "nmrNumber": args.nmr,
            "password": password,
            "specialization": args.specialization,
            "aboutMe": args.about,
        }
    )
    print(f"Account created for {args.name}")
    if not auth.persisted:
        print("No session was saved. Run 'doctor-connect login' to sign in.")
    return 0


async def _whoami(api: DoctorApi, args: argparse.Namespace) -> int:
    profile = await (api.profile.refresh_profile() if args.refresh else api.profile.load_doctor_profile())
    if profile is None:
        print("Not logged in. Run 'doctor-connect login' first.")
        return 1
    for field, value in profile.to_record().items():
        print(f"{field}: {value}")
    return 0


async def _requests(api: DoctorApi, args: argparse.Namespace) -> int:
    requests = await api.patient_requests.get_patient_requests()
    pending = [r for r in requests if r.is_pending]
    print(f"{len(pending)} pending requests")
    for request in requests:
        print(
            f"[{request.priority.value}] {request.id} {request.patientName or '-'} "
            f"({request.patientPhoneNumber or '-'}) status={request.status or '-'} "
            f"requested={request.reqTime or '-'}"
        )
    return 0


async def _accept(api: DoctorApi, args: argparse.Namespace) -> int:
    await api.patient_requests.accept_request(args.request_id)
    print("Patient request accepted successfully!")
    return 0


async def _reject(api: DoctorApi, args: argparse.Namespace) -> int:
    await api.patient_requests.reject_request(args.request_id)
    print("Patient request has been rejected.")
    return 0


async def _logout(api: DoctorApi, args: argparse.Namespace) -> int:
    if not await api.auth.logout():
        print("Logout failed. Please try again.")
        return 1
    print("Logged out")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="doctor-connect", description="Doctor Connect client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Log in with email and password")
    login.add_argument("--email", required=True)
    login.add_argument("--password")
    login.set_defaults(handler=_login)

    signup = subparsers.add_parser("signup", help="Create a doctor account")
    signup.add_argument("--name", default="")
    signup.add_argument("--phone", default="")
    signup.add_argument("--email", default="")
    signup.add_argument("--nmr", default="", help="National Medical Register number")
    signup.add_argument("--specialization", default="")
    signup.add_argument("--about", default=None)
    signup.add_argument("--password")
    signup.set_defaults(handler=_signup)

    whoami = subparsers.add_parser("whoami", help="Show the signed-in doctor")
    whoami.add_argument("--refresh", action="store_true", help="Re-verify the token with the server")
    whoami.set_defaults(handler=_whoami)

    requests = subparsers.add_parser("requests", help="List patient requests")
    requests.set_defaults(handler=_requests)

    accept = subparsers.add_parser("accept", help="Accept a patient request")
    accept.add_argument("request_id")
    accept.set_defaults(handler=_accept)

    reject = subparsers.add_parser("reject", help="Reject a patient request")
    reject.add_argument("request_id")
    reject.set_defaults(handler=_reject)

    logout = subparsers.add_parser("logout", help="Clear the stored session")
    logout.set_defaults(handler=_logout)

    return parser


async def run(args: argparse.Namespace, api: DoctorApi | None = None) -> int:
    api = api or create_doctor_api()
    try:
        return await args.handler(api, args)
    except DoctorApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if not await api.session.has_session() and args.command not in ("login", "signup", "logout"):
            print("Session expired. Please log in again.", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {get_exception_message(e)}", file=sys.stderr)
        return 1
    finally:
        await api.close()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
        )

    args = build_parser().parse_args(argv)
    logger.debug(f"Running '{args.command}' against {settings.API_BASE_URL}")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
