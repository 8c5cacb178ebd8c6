import requests
import argparse
from random import randint
from concurrent.futures import ThreadPoolExecutor, as_completed
import time


def random_payload(request_num: int) -> dict:
    r, g, b = randint(0, 255), randint(0, 255), randint(0, 255)
    if request_num % 2:
        color = f"rgb({r}, {g}, {b})"
    else:
        color = f"#{r:02X}{g:02X}{b:02X}"
    return {
        "name": f"Seed {request_num}",
        "color": color,
    }


def send_color_request(url: str, request_num: int) -> str:
    """Function to send a single save request"""
    try:
        response = requests.post(url, json=random_payload(request_num), timeout=10)
        return f"Request {request_num}: Status {response.status_code}"
    except requests.RequestException as e:
        return f"Request {request_num}: Error {str(e)}"

def main():
    parser = argparse.ArgumentParser(description="Fire concurrent color saves at a running server")
    parser.add_argument("--url", type=str, default="http://localhost:8080/api/colors")
    parser.add_argument("--count", type=int, default=500)
    parser.add_argument("--workers", type=int, default=20)
    args = parser.parse_args()

    start_time = time.time()

    with ThreadPoolExecutor(max_workers=args.workers) as executor:
        futures = [executor.submit(send_color_request, args.url, i) for i in range(args.count)]

        for future in as_completed(futures):
            print(future.result())

    end_time = time.time()
    print(f"Total time: {end_time - start_time:.2f} seconds")

if __name__ == "__main__":
    main()
