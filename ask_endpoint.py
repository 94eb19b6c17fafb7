"""
Posts one question to a running server's /ask endpoint and prints the result.
"""

import argparse
import sys

import requests

DEFAULT_URL = "http://localhost:3000/ask"
DEFAULT_QUESTION = "What information is available in the documents?"


def ask(question, url=DEFAULT_URL, timeout=120):
    resp = requests.post(url, json={"question": question}, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send a question to the /ask endpoint")
    parser.add_argument("question", nargs="?", default=DEFAULT_QUESTION)
    parser.add_argument("--url", default=DEFAULT_URL)
    args = parser.parse_args(argv)

    print("Testing /ask endpoint...")
    try:
        data = ask(args.question, args.url)
    except requests.HTTPError as e:
        print(f"Error response: {e.response.text}", file=sys.stderr)
        return 1
    except requests.ConnectionError:
        print("No response received. Is the server running?", file=sys.stderr)
        return 1

    print("\nResponse:")
    print("Answer:", data.get("answer"))
    print("Source:", data.get("source"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
