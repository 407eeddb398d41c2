#This file is for development purposes only

import argparse
import logging

from jira_session_client import get_client


def main():
    parser = argparse.ArgumentParser(description="Smoke test a Jira instance.")
    parser.add_argument("issue", nargs="?", default="OPS-20", help="issue key to look up")
    parser.add_argument("-v", "--verbose", action="store_true", help="log each login and request")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    client = get_client(interactive=True)

    print("\nListing projects...")
    result = client.list_projects()
    if result.ok:
        for project in result.value:
            print(f"- {project.get('key')}: {project.get('name')}")
    else:
        print(f"Error talking to Jira: {result.error}")

    # callback style works too
    client.find_issue(
        args.issue,
        callback=lambda error, issue: print(
            f"Error talking to Jira: {error}" if error else f"- {issue['key']}: {issue['fields'].get('summary')}"
        ),
    )


if __name__ == "__main__":
    main()
