# Beginner English-Chinese vocabulary grouped by topic.
# Word ids are unique across all categories.

CATEGORIES = [
    {
        "id": 1,
        "name": "Basics",
        "description": "The most common words of everyday life",
        "words": [
            {"id": 1, "text": "Hello", "translation": "你好", "pinyin": "nǐ hǎo",
             "example": "Hello, how are you?", "example_translation": "你好，你好吗？", "difficulty": "easy"},
            {"id": 2, "text": "Thank you", "translation": "谢谢", "pinyin": "xiè xiè",
             "example": "Thank you for your help.", "example_translation": "谢谢你的帮助。", "difficulty": "easy"},
            {"id": 3, "text": "Yes", "translation": "是", "pinyin": "shì",
             "example": "Yes, I understand.", "example_translation": "是的，我明白。", "difficulty": "easy"},
            {"id": 4, "text": "No", "translation": "不", "pinyin": "bù",
             "example": "No, I don't want it.", "example_translation": "不，我不想要。", "difficulty": "easy"},
            {"id": 5, "text": "Sorry", "translation": "对不起", "pinyin": "duì bù qǐ",
             "example": "I'm sorry I'm late.", "example_translation": "对不起，我迟到了。", "difficulty": "easy"},
            {"id": 6, "text": "Please", "translation": "请", "pinyin": "qǐng",
             "example": "Please help me.", "example_translation": "请帮助我。", "difficulty": "easy"},
            {"id": 7, "text": "Goodbye", "translation": "再见", "pinyin": "zài jiàn",
             "example": "Goodbye, see you tomorrow.", "example_translation": "再见，明天见。", "difficulty": "easy"},
            {"id": 8, "text": "Friend", "translation": "朋友", "pinyin": "péng yǒu",
             "example": "He is my good friend.", "example_translation": "他是我的好朋友。", "difficulty": "easy"},
        ],
    },
    {
        "id": 2,
        "name": "Numbers",
        "description": "Basic numbers and counting",
        "words": [
            {"id": 9, "text": "One", "translation": "一", "pinyin": "yī",
             "example": "I need one ticket.", "example_translation": "我需要一张票。", "difficulty": "easy"},
            {"id": 10, "text": "Two", "translation": "二", "pinyin": "èr",
             "example": "I have two brothers.", "example_translation": "我有两个兄弟。", "difficulty": "easy"},
            {"id": 11, "text": "Three", "translation": "三", "pinyin": "sān",
             "example": "There are three books on the table.", "example_translation": "桌子上有三本书。",
             "difficulty": "easy"},
            {"id": 12, "text": "Four", "translation": "四", "pinyin": "sì",
             "example": "We need four chairs.", "example_translation": "我们需要四把椅子。", "difficulty": "easy"},
            {"id": 13, "text": "Five", "translation": "五", "pinyin": "wǔ",
             "example": "I have five fingers on my hand.", "example_translation": "我手上有五个手指。",
             "difficulty": "easy"},
            {"id": 14, "text": "Ten", "translation": "十", "pinyin": "shí",
             "example": "There are ten people in the room.", "example_translation": "房间里有十个人。",
             "difficulty": "medium"},
            {"id": 15, "text": "Hundred", "translation": "百", "pinyin": "bǎi",
             "example": "This book costs one hundred yuan.", "example_translation": "这本书花费一百元。",
             "difficulty": "medium"},
            {"id": 16, "text": "Thousand", "translation": "千", "pinyin": "qiān",
             "example": "There are more than a thousand students in the school.",
             "example_translation": "学校里有超过一千名学生。", "difficulty": "medium"},
            {"id": 17, "text": "Ten thousand", "translation": "万", "pinyin": "wàn",
             "example": "The car costs ten thousand dollars.", "example_translation": "这辆车要一万美元。",
             "difficulty": "medium"},
            {"id": 18, "text": "Million", "translation": "百万", "pinyin": "bǎi wàn",
             "example": "The company is worth millions of dollars.", "example_translation": "这家公司价值数百万美元。",
             "difficulty": "hard"},
        ],
    },
    {
        "id": 3,
        "name": "Food",
        "description": "Common food and drinks",
        "words": [
            {"id": 19, "text": "Rice", "translation": "米饭", "pinyin": "mǐ fàn",
             "example": "I eat rice every day.", "example_translation": "我每天吃米饭。", "difficulty": "easy"},
            {"id": 20, "text": "Noodles", "translation": "面条", "pinyin": "miàn tiáo",
             "example": "I like to eat noodles for lunch.", "example_translation": "我喜欢午餐吃面条。",
             "difficulty": "easy"},
            {"id": 21, "text": "Vegetables", "translation": "蔬菜", "pinyin": "shū cài",
             "example": "Eating vegetables is good for your health.", "example_translation": "吃蔬菜对健康有好处。",
             "difficulty": "medium"},
            {"id": 22, "text": "Fruit", "translation": "水果", "pinyin": "shuǐ guǒ",
             "example": "I like to eat fruit after dinner.", "example_translation": "我喜欢晚饭后吃水果。",
             "difficulty": "medium"},
            {"id": 23, "text": "Meat", "translation": "肉", "pinyin": "ròu",
             "example": "He doesn't eat meat.", "example_translation": "他不吃肉。", "difficulty": "easy"},
            {"id": 24, "text": "Water", "translation": "水", "pinyin": "shuǐ",
             "example": "I drink a lot of water every day.", "example_translation": "我每天喝很多水。",
             "difficulty": "easy"},
            {"id": 25, "text": "Tea", "translation": "茶", "pinyin": "chá",
             "example": "Would you like a cup of tea?", "example_translation": "你想喝一杯茶吗？", "difficulty": "easy"},
        ],
    },
]
