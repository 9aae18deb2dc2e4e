#!/usr/bin/env python3
"""
Basic bbclone usage example.

Lists the repositories of a Bitbucket account and shows how each would be
cloned, without running any clone.

Usage: python examples/basic_usage.py OWNER [LOGIN]
"""

import sys

from bbclone import BbCloneError, BitbucketClient, clone_command, resolve_credentials


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__.strip().splitlines()[-1], file=sys.stderr)
        sys.exit(1)

    owner = sys.argv[1]
    credentials = resolve_credentials(sys.argv[2]) if len(sys.argv) > 2 else None

    print(f"=== Repositories of {owner} ===\n")

    try:
        with BitbucketClient.from_env(credentials=credentials) as client:
            repositories = client.repos.list(owner)
    except BbCloneError as e:
        print(f"   Listing failed: {e}")
        sys.exit(1)

    for repo in repositories:
        visibility = "private" if repo.is_private else "public"
        print(f"{repo.full_name} ({repo.scm}, {visibility})")

        url = repo.ssh_clone_url
        if url is None:
            print("   no ssh clone link")
            continue

        try:
            print(f"   {' '.join(clone_command(url))}")
        except BbCloneError as e:
            print(f"   {e}")

    print(f"\n{len(repositories)} repositories")


if __name__ == "__main__":
    main()
