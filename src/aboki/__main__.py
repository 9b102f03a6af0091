from aboki.cli import main

main()
