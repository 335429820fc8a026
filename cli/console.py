"""Console UI for the stop game."""

import time

from cli.api_client import StopAPIClient


class ConsoleUI:
    """Console user interface for the stop game."""

    def __init__(self, client: StopAPIClient):
        self.client = client

    def print_results(self, result: dict):
        """Print the per-category verdict and totals."""
        print('\n' + '=' * 60)
        print(f'RESULTS (letter {result["letter"]})')
        print('=' * 60)
        print(f'{"Category":<20}{"You":<16}{"Pts":>4}  {"Opponent":<16}{"Pts":>4}')
        for row in result['categories']:
            you = row['human_answer'].strip() or '-'
            them = row['opponent_answer'].strip() or '-'
            print(f'{row["category_name"]:<20}{you[:15]:<16}{row["human_points"]:>4}  '
                  f'{them[:15]:<16}{row["opponent_points"]:>4}')
        print('-' * 60)
        print(f'Total: you {result["totals"]["player"]} x {result["totals"]["opponent"]} opponent')
        self.print_profile(result['profile'])

    def print_profile(self, profile: dict):
        print(f'Opponent level {profile["level"]} | '
              f'experience {profile["experience_in_level"]} | '
              f'success rate {profile["success_rate"]}')
        print('=' * 60)

    def print_history(self, rounds: list):
        print('\n--- RECENT GAMES ---')
        if not rounds:
            print('No games played yet')
        for r in rounds:
            print(f'{r["date"][:16]}  {r["name"]:<15} letter {r["letter"]}  '
                  f'{r["player_points"]} x {r["opponent_points"]}')
        print('--------------------')

    def print_rankings(self, rankings: list):
        print('\n--- PLAYER RANKINGS ---')
        if not rankings:
            print('No player history available')
        for i, player in enumerate(rankings, start=1):
            print(f'#{i} {player["name"]:<15} games: {player["games_played"]}  '
                  f'average: {player["average_points"]}  best: {player["best_score"]}')
        print('-----------------------')

    def choose_time_limit(self, time_limits: list, default: int) -> int:
        options = '/'.join(str(t) for t in time_limits)
        while True:
            choice = input(f'Time limit in seconds ({options}, enter for {default}): ').strip()
            if not choice:
                return default
            if choice.isdigit() and int(choice) in time_limits:
                return int(choice)
            print('Please choose one of the listed time limits.')

    def play_round(self, config: dict):
        time_limit = self.choose_time_limit(config['time_limits'], config['default_time_limit'])
        round_info = self.client.start_round(time_limit)
        letter = round_info['letter']
        deadline = time.time() + round_info['time_limit']

        print(f'\n>>> Letter: {letter}  ({round_info["time_limit"]}s, type "quit" to abandon)')
        answers = {}
        for category in round_info['categories']:
            remaining = int(deadline - time.time())
            if remaining <= 0:
                print('STOP! Time is up.')
                break
            answer = input(f'[{remaining:>3}s] {category["name"]}: ')
            if answer.strip().lower() == 'quit':
                self.client.abandon_round()
                print('Round abandoned.')
                return
            if time.time() > deadline:
                print('STOP! Time is up, last answer not counted.')
                break
            answers[category['key']] = answer

        print('Scoring...')
        result = self.client.finish_round(answers)
        self.print_results(result)

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to stop server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        players = self.client.get_players()['players']
        if players:
            print(f"Known players: {', '.join(players)}")

        player_name = ''
        while not player_name:
            player_name = input('Your name: ').strip()
        session = self.client.create_session(player_name)
        self.print_profile(session['profile'])
        config = self.client.get_config()

        while True:
            command = input('\n[p]lay, [h]istory, [r]ankings or e[x]it: ').strip().lower()
            if command in ('x', 'exit'):
                self.client.end_session()
                print('Goodbye!')
                return
            try:
                if command in ('p', 'play', ''):
                    self.play_round(config)
                elif command in ('h', 'history'):
                    self.print_history(self.client.get_history()['rounds'])
                elif command in ('r', 'rankings'):
                    self.print_rankings(self.client.get_rankings()['rankings'])
                else:
                    print('Unknown command.')
            except Exception as e:
                print(f"Error talking to server: {e}")
