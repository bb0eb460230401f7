from .cli import start_api

if __name__ == "__main__":
    start_api()
