"""Entry point for running bot and API: python -m solswap"""

from dotenv import load_dotenv
load_dotenv()

from solswap.main import main

if __name__ == "__main__":
    main()
