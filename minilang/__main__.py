from minilang.main import main


main()
