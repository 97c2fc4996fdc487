from mcp_docs_search.server import main


main()
