import argparse
import asyncio
import getpass

from seva_portal.deps import get_repo
from seva_portal.services.seed import ensure_admin

def parse_args():
    p = argparse.ArgumentParser(description="Create an admin account for the Seva Portal console.")
    p.add_argument("email")
    p.add_argument("--name", default="Admin")
    p.add_argument("--role", choices=["super_admin", "admin", "moderator"], default="admin")
    p.add_argument("--password", help="prompted for when omitted")
    return p.parse_args()

async def main(args):
    password = args.password or getpass.getpass("Password: ")
    repo = get_repo()
    await repo.ensure_indexes()
    admin = await ensure_admin(repo, args.email, password, name=args.name, role=args.role)
    print("Admin ready:", admin["email"], f"({admin['role']})")
    repo.close()

if __name__ == "__main__":
    asyncio.run(main(parse_args()))
