from docs_search_indexer.cli import main

main()
