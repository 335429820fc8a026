"""Static word lists for every category.

Within a category, words are listed most common first for each letter;
the opponent only uses the first few per letter at low levels.
"""

from .interfaces import AnswerSource, WordChecker
from .models import Category, to_category
from .utils import first_letter, fold_accents, normalize_answer

WORD_LISTS = {
    'name': [
        'Ana', 'Alice', 'Arthur', 'Bruno', 'Beatriz', 'Benjamin', 'Carla', 'Camilo', 'Clara',
        'Daniel', 'Diana', 'Diego', 'Eduardo', 'Emma', 'Elisa', 'Felipe', 'Fernanda', 'Fabio',
        'Gabriel', 'Giulia', 'Gustavo', 'Helena', 'Hugo', 'Heitor', 'Isabel', 'Igor', 'Iris',
        'Julia', 'Joana', 'Jorge', 'Lucas', 'Laura', 'Leonardo', 'Maria', 'Mateus', 'Marina',
        'Nina', 'Nicolas', 'Natalia', 'Olivia', 'Oscar', 'Otavio', 'Pedro', 'Paula', 'Patricia',
        'Quentin', 'Quiteria', 'Rafael', 'Rita', 'Rodrigo', 'Sofia', 'Samuel', 'Sara', 'Tiago',
        'Teresa', 'Tomas', 'Ursula', 'Ulisses', 'Vitor', 'Vera', 'Valentina', 'Zoe', 'Zeca'
    ],
    'place': [
        'airport', 'aquarium', 'bakery', 'beach', 'bank', 'church', 'cinema', 'castle',
        'desert', 'dock', 'embassy', 'elevator', 'farm', 'forest', 'factory', 'garden', 'gym',
        'garage', 'hospital', 'hotel', 'harbor', 'island', 'inn', 'jungle', 'jail', 'library',
        'lake', 'market', 'museum', 'mall', 'nursery', 'office', 'orchard', 'park', 'pharmacy',
        'prison', 'quarry', 'restaurant', 'river', 'school', 'stadium', 'supermarket',
        'theater', 'temple', 'university', 'valley', 'village', 'zoo'
    ],
    'country': [
        'Argentina', 'Angola', 'Australia', 'Brazil', 'Belgium', 'Bolivia', 'Canada', 'Chile',
        'China', 'Denmark', 'Dominica', 'Egypt', 'Ecuador', 'Estonia', 'France', 'Finland',
        'Fiji', 'Germany', 'Greece', 'Ghana', 'Haiti', 'Hungary', 'Honduras', 'India', 'Italy',
        'Ireland', 'Japan', 'Jamaica', 'Jordan', 'Lebanon', 'Libya', 'Luxembourg', 'Mexico',
        'Morocco', 'Mozambique', 'Norway', 'Nigeria', 'Nepal', 'Oman', 'Portugal', 'Peru',
        'Poland', 'Qatar', 'Russia', 'Romania', 'Rwanda', 'Spain', 'Sweden', 'Senegal',
        'Turkey', 'Thailand', 'Tunisia', 'Uruguay', 'Ukraine', 'Uganda', 'Venezuela',
        'Vietnam', 'Vanuatu', 'Zambia', 'Zimbabwe'
    ],
    'animal': [
        'ant', 'alligator', 'antelope', 'bear', 'bee', 'buffalo', 'cat', 'cow', 'camel', 'dog',
        'dolphin', 'duck', 'eagle', 'elephant', 'eel', 'fox', 'frog', 'flamingo', 'giraffe',
        'goat', 'gorilla', 'horse', 'hippopotamus', 'hamster', 'iguana', 'impala', 'ibis',
        'jaguar', 'jellyfish', 'jackal', 'lion', 'lizard', 'llama', 'monkey', 'mouse', 'moose',
        'newt', 'nightingale', 'narwhal', 'octopus', 'owl', 'ostrich', 'parrot', 'panda',
        'pig', 'quail', 'rabbit', 'rat', 'rhinoceros', 'snake', 'shark', 'sheep', 'tiger',
        'turtle', 'toad', 'urchin', 'vulture', 'viper', 'zebra'
    ],
    'object': [
        'anchor', 'armchair', 'bottle', 'book', 'bucket', 'chair', 'cup', 'clock', 'desk',
        'drum', 'doll', 'envelope', 'eraser', 'fork', 'fan', 'flashlight', 'glass', 'glove',
        'guitar', 'hammer', 'hat', 'hanger', 'iron', 'jar', 'jacket', 'jug', 'lamp', 'ladder',
        'lock', 'mirror', 'mug', 'magnet', 'needle', 'notebook', 'napkin', 'oven', 'pencil',
        'pillow', 'plate', 'quilt', 'ruler', 'radio', 'rope', 'spoon', 'scissors', 'sofa',
        'table', 'towel', 'telephone', 'umbrella', 'vase', 'violin', 'zipper'
    ],
    'color': [
        'amber', 'aqua', 'azure', 'blue', 'black', 'beige', 'crimson', 'cyan', 'coral',
        'denim', 'emerald', 'ebony', 'fuchsia', 'gold', 'green', 'gray', 'honey', 'indigo',
        'ivory', 'jade', 'lilac', 'lavender', 'lime', 'magenta', 'maroon', 'mauve', 'navy',
        'nude', 'ochre', 'olive', 'orange', 'pink', 'purple', 'peach', 'red', 'rose', 'ruby',
        'silver', 'scarlet', 'salmon', 'teal', 'turquoise', 'tan', 'umber', 'violet',
        'vermilion', 'zaffre'
    ],
    'element': [
        'aluminum', 'argon', 'arsenic', 'boron', 'bromine', 'barium', 'carbon', 'calcium',
        'copper', 'chlorine', 'fluorine', 'francium', 'gold', 'gallium', 'germanium',
        'hydrogen', 'helium', 'iron', 'iodine', 'iridium', 'lead', 'lithium', 'magnesium',
        'mercury', 'manganese', 'neon', 'nitrogen', 'nickel', 'oxygen', 'osmium', 'phosphorus',
        'platinum', 'potassium', 'radon', 'radium', 'rubidium', 'silver', 'sodium', 'sulfur',
        'tin', 'titanium', 'tungsten', 'uranium', 'vanadium', 'zinc', 'zirconium'
    ],
    'profession': [
        'architect', 'actor', 'accountant', 'baker', 'barber', 'biologist', 'carpenter',
        'chef', 'cashier', 'doctor', 'dentist', 'designer', 'engineer', 'electrician',
        'economist', 'farmer', 'firefighter', 'fisherman', 'gardener', 'geologist', 'guide',
        'hairdresser', 'historian', 'illustrator', 'inspector', 'interpreter', 'journalist',
        'judge', 'jeweler', 'lawyer', 'librarian', 'lifeguard', 'mechanic', 'musician',
        'mathematician', 'nurse', 'notary', 'nutritionist', 'optician', 'officer', 'pilot',
        'plumber', 'painter', 'quarryman', 'reporter', 'receptionist', 'surgeon', 'sailor',
        'secretary', 'teacher', 'tailor', 'translator', 'umpire', 'veterinarian', 'vendor',
        'zookeeper'
    ],
    'media': [
        'Avatar', 'Aladdin', 'Amelie', 'Batman', 'Bambi', 'Casablanca', 'Cinderella', 'Coco',
        'Dune', 'Dracula', 'Encanto', 'Elf', 'Frozen', 'Friends', 'Fargo', 'Gladiator',
        'Grease', 'Hamlet', 'Hercules', 'Heidi', 'Inception', 'Interstellar', 'Jaws',
        'Jumanji', 'Lost', 'Luca', 'Matilda', 'Moana', 'Mulan', 'Narnia', 'Nope',
        'Oppenheimer', 'Othello', 'Psycho', 'Pinocchio', 'Rocky', 'Rambo', 'Rebecca', 'Shrek',
        'Seinfeld', 'Titanic', 'Tarzan', 'Up', 'Ulysses', 'Vertigo', 'Zootopia', 'Zorro'
    ],
    'brand': [
        'Adidas', 'Apple', 'Amazon', 'BMW', 'Bic', 'Burberry', 'Canon', 'Chanel', 'Dell',
        'Disney', 'Dior', 'Epson', 'Ferrari', 'Fiat', 'Ford', 'Gucci', 'Google', 'Gillette',
        'Honda', 'Heineken', 'Hermes', 'IBM', 'Ikea', 'Intel', 'Jeep', 'Lego', 'Lacoste',
        'Levis', 'Microsoft', 'Mercedes', 'Nike', 'Nestle', 'Nokia', 'Oreo', 'Omega', 'Puma',
        'Pepsi', 'Prada', 'Rolex', 'Renault', 'Samsung', 'Sony', 'Toyota', 'Tesla', 'Uber',
        'Unilever', 'Visa', 'Volvo', 'Zara'
    ],
    'plant': [
        'aloe', 'azalea', 'bamboo', 'basil', 'begonia', 'cactus', 'clover', 'cedar', 'daisy',
        'dandelion', 'eucalyptus', 'edelweiss', 'fern', 'fig tree', 'geranium', 'ginger',
        'hibiscus', 'hydrangea', 'ivy', 'iris', 'jasmine', 'juniper', 'lavender', 'lily',
        'lotus', 'mint', 'moss', 'magnolia', 'nettle', 'oak', 'orchid', 'oregano', 'palm',
        'pine', 'peony', 'rose', 'rosemary', 'sunflower', 'sage', 'tulip', 'thyme', 'violet',
        'verbena', 'zinnia'
    ],
    'verb': [
        'act', 'ask', 'arrive', 'build', 'bake', 'buy', 'climb', 'cook', 'cry', 'dance',
        'drink', 'dream', 'eat', 'explore', 'enjoy', 'fly', 'find', 'fight', 'go', 'give',
        'grow', 'help', 'hide', 'hear', 'imagine', 'invent', 'jump', 'joke', 'laugh', 'learn',
        'listen', 'move', 'make', 'meet', 'need', 'negotiate', 'open', 'order', 'observe',
        'play', 'paint', 'pull', 'quit', 'question', 'run', 'read', 'rest', 'sing', 'swim',
        'sleep', 'talk', 'travel', 'think', 'understand', 'use', 'visit', 'vote', 'zoom'
    ],
    'adjective': [
        'angry', 'able', 'agile', 'big', 'bright', 'brave', 'calm', 'clever', 'cold', 'dark',
        'deep', 'dirty', 'easy', 'elegant', 'empty', 'fast', 'funny', 'fragile', 'good',
        'gentle', 'great', 'happy', 'heavy', 'honest', 'idle', 'intelligent', 'immense',
        'jolly', 'juicy', 'lazy', 'light', 'loud', 'mean', 'modest', 'messy', 'nice', 'noisy',
        'narrow', 'old', 'open', 'odd', 'pretty', 'proud', 'polite', 'quick', 'quiet', 'rich',
        'rough', 'rare', 'sad', 'small', 'strong', 'tall', 'tiny', 'tired', 'ugly', 'useful',
        'vast', 'vivid', 'zealous'
    ],
    'emotion': [
        'anger', 'anxiety', 'awe', 'boredom', 'bliss', 'calm', 'compassion', 'contempt',
        'despair', 'delight', 'disgust', 'envy', 'excitement', 'euphoria', 'fear',
        'frustration', 'gratitude', 'guilt', 'grief', 'happiness', 'hope', 'hatred',
        'irritation', 'insecurity', 'joy', 'jealousy', 'love', 'loneliness', 'melancholy',
        'nostalgia', 'nervousness', 'optimism', 'outrage', 'pride', 'panic', 'pity', 'rage',
        'relief', 'regret', 'sadness', 'shame', 'surprise', 'tenderness', 'terror', 'unease',
        'vanity', 'zeal'
    ],
    'continent': [
        'Africa', 'America', 'Antarctica', 'Asia', 'Europe', 'North America', 'Oceania',
        'South America', 'Australia'
    ],
    'fruit': [
        'apple', 'apricot', 'avocado', 'banana', 'blueberry', 'blackberry', 'cherry',
        'coconut', 'cranberry', 'date', 'dragonfruit', 'durian', 'elderberry', 'fig', 'grape',
        'guava', 'grapefruit', 'honeydew', 'jackfruit', 'jabuticaba', 'lemon', 'lime',
        'lychee', 'mango', 'melon', 'mandarin', 'nectarine', 'orange', 'olive', 'papaya',
        'peach', 'pear', 'pineapple', 'quince', 'raspberry', 'strawberry', 'starfruit',
        'tangerine', 'tamarind', 'ugli fruit', 'watermelon'
    ]
}

# Normalized lookup sets per category
_WORD_SETS = {
    category: {fold_accents(normalize_answer(word)) for word in words}
    for category, words in WORD_LISTS.items()
}


def get_category_words(category) -> list[str]:
    """Get the word list for a category."""
    return list(WORD_LISTS.get(to_category(category).value, []))


def words_starting_with(category, letter: str) -> list[str]:
    """Words of a category that start with letter, in list order."""
    letter = letter.upper()
    return [w for w in get_category_words(category) if first_letter(w) == letter]


def is_known_word(word: str, category) -> bool:
    """Check whether word appears in the category's word list."""
    key = fold_accents(normalize_answer(word))
    return key in _WORD_SETS.get(to_category(category).value, set())


class WordListSource(AnswerSource):
    """Answer source backed by the static word lists."""

    def candidates(self, letter: str, category) -> list[str]:
        return words_starting_with(category, letter)


class WordListChecker(WordChecker):
    """Accepts only words found in the static word lists."""

    def is_plausible(self, word: str, category) -> bool:
        return is_known_word(word, category)


class AcceptAllChecker(WordChecker):
    """Accepts any word; the validator's shape rules still apply."""

    def is_plausible(self, word: str, category) -> bool:
        return True


def export_word_lists() -> list[dict]:
    """Flatten the word lists into {category, word, letter} rows."""
    rows = []
    for category in Category:
        for word in WORD_LISTS.get(category.value, []):
            rows.append({
                'category': category.value,
                'word': word,
                'letter': first_letter(word)
            })
    return rows
