import requests
import os
import argparse

proxy_base_url = os.getenv('PROXY_BASE_URL', 'http://localhost:8000')

ROUTES = {
    'font': '/api/fontProxy',
    'image': '/api/imageProxy',
    'catalog': '/api/store-movies',
}


def check_variant(variant, url=None):
    params = {'url': url} if url else None
    response = requests.get(f'{proxy_base_url}{ROUTES[variant]}', params=params)

    if response.status_code != 200:
        print(f"Error with status code: {response.status_code}, "
              f"Source: {response.headers.get('X-Fetchgate-Error')}, "
              f"Message: {response.text}")
        return

    print(f"Content-Type: {response.headers.get('Content-Type')}")
    print(f"Cache-Control: {response.headers.get('Cache-Control')}")
    print(f"Access-Control-Allow-Origin: {response.headers.get('Access-Control-Allow-Origin')}")
    print(f"Received {len(response.content)} bytes")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Fetch a resource through a running '
                                     'fetchgate deployment and print the relayed headers.')
    parser.add_argument('variant', choices=sorted(ROUTES), help='The proxy variant to call.')
    parser.add_argument('url', nargs='?', help='Upstream URL (font and image variants).')
    args = parser.parse_args()

    check_variant(args.variant, args.url)
