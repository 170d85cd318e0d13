from __future__ import annotations

from pokeapi_endpoints.lookup_tool import main


if __name__ == "__main__":
    main()
