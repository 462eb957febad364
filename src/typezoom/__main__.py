from typezoom.cli import main

main()
